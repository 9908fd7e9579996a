"""Schema commands: list form types, show a schema, validate one value."""

import typer

from dynamic_forms.cli._app import app
from dynamic_forms.cli._common import build_engine, init_command
from dynamic_forms.cli._console import console, output_result, output_table, print_err, print_ok
from dynamic_forms.runtime.schema_loader import get_field_summaries
from dynamic_forms.runtime.validators import validate_field
from dynamic_forms.schemas.errors import SchemaNotFound


@app.command("form-types", help="List the form types available in the selector.")
def form_types_cmd(ctx: typer.Context):
    """List registered form types with their titles and field counts."""
    settings = init_command(ctx)
    engine = build_engine(settings)
    registry = engine.registry

    rows = []
    for value, label in registry.choices():
        if not value:
            continue
        schema = registry.lookup(value)
        rows.append({"form_type": value, "title": label, "fields": len(schema.fields)})

    output_table(rows, ctx=ctx, title="Form types", columns=["form_type", "title", "fields"])


@app.command("show", help="Show the fields of a form type.")
def show_cmd(
    ctx: typer.Context,
    form_type: str = typer.Argument(..., help="Form type identifier, e.g. userInfo"),
):
    """Render a schema's field list."""
    settings = init_command(ctx)
    engine = build_engine(settings)

    try:
        schema = engine.registry.require(form_type)
    except SchemaNotFound:
        print_err(f"Unknown form type: {form_type}")
        raise SystemExit(1)

    summaries = get_field_summaries(schema)
    if ctx.obj["json"]:
        output_result({"form_type": schema.form_type, "title": schema.title, "fields": summaries}, ctx=ctx)
        return

    rows = []
    for s in summaries:
        rows.append({
            "name": s["name"],
            "type": s["type"],
            "label": s["label"],
            "required": "yes" if s["required"] else "no",
            "options": ", ".join(s["options"]),
            "pattern": s["pattern"] or "",
        })
    output_table(rows, ctx=ctx, title=schema.title)


@app.command("validate", help="Validate a single value against a field.")
def validate_cmd(
    ctx: typer.Context,
    form_type: str = typer.Argument(..., help="Form type identifier"),
    field_name: str = typer.Argument(..., help="Field name within the form type"),
    value: str = typer.Argument("", help="Value to check (omit for empty)"),
):
    """Run the field validator once and report the result."""
    settings = init_command(ctx)
    engine = build_engine(settings)

    try:
        schema = engine.registry.require(form_type)
    except SchemaNotFound:
        print_err(f"Unknown form type: {form_type}")
        raise SystemExit(1)

    field_def = schema.get_field(field_name)
    if field_def is None:
        print_err(f"Unknown field '{field_name}' for form type {form_type}")
        raise SystemExit(1)

    result = validate_field(field_def, value)

    if ctx.obj["json"]:
        output_result({"field": field_name, "valid": result.valid, "message": result.message}, ctx=ctx)
    elif result.valid:
        print_ok(f"{field_def.label}: valid")
    else:
        console.print(f"[red]✗[/red] {field_def.label}: {result.message}")

    if not result.valid:
        raise SystemExit(1)
