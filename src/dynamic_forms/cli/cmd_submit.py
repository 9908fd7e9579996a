"""Submit command: fill a form type from name=value pairs and commit it."""

from typing import List

import typer

from dynamic_forms.cli._app import app
from dynamic_forms.cli._common import build_engine, init_command, parse_assignments
from dynamic_forms.cli._console import console, output_result, output_table, print_err, print_ok
from dynamic_forms.schemas.errors import UnknownField, ValidationFailed


@app.command("submit", help="Fill a form and submit it as a record.")
def submit_cmd(
    ctx: typer.Context,
    form_type: str = typer.Argument(..., help="Form type identifier, e.g. paymentInfo"),
    assignments: List[str] = typer.Option(
        None,
        "--set", "-s",
        help="Field value as name=value (repeatable)",
    ),
):
    """Drive one session through select, set and commit."""
    settings = init_command(ctx)
    engine = build_engine(settings)

    try:
        pairs = parse_assignments(assignments)
    except ValueError as e:
        print_err(str(e))
        raise SystemExit(1)

    if engine.select_form_type(form_type) is None:
        print_err(f"Unknown form type: {form_type}")
        raise SystemExit(1)

    for name, value in pairs:
        try:
            engine.set_field_value(name, value)
        except UnknownField as e:
            print_err(e.message)
            raise SystemExit(1)

    progress = engine.session.progress

    try:
        result = engine.commit()
    except ValidationFailed as e:
        if ctx.obj["json"]:
            output_result(
                {"committed": False, "progress": progress, "errors": e.errors},
                ctx=ctx,
            )
        else:
            console.print(f"Progress: {settings.format_progress(progress)}")
            for name, message in e.errors.items():
                print_err(f"{name}: {message}")
        raise SystemExit(1)

    if ctx.obj["json"]:
        output_result(
            {
                "committed": True,
                "action": result.action.value,
                "index": result.index,
                "message": result.message,
                "progress": progress,
                "record": result.record.to_dict(),
            },
            ctx=ctx,
        )
        return

    console.print(f"Progress: {settings.format_progress(progress)}")
    print_ok(result.message)
    columns, rows = engine.store.table()
    output_table(
        [dict(zip(columns, row)) for row in rows],
        ctx=ctx,
        title="Submitted Data",
        columns=columns,
    )
