"""Walk the engine through create, failed commit, edit and delete."""

from rich.console import Console
from rich.table import Table

from dynamic_forms import FormEngine
from dynamic_forms.runtime import DELETE_MESSAGE
from dynamic_forms.schemas import ValidationFailed

console = Console()


def show_records(engine: FormEngine) -> None:
    snap = engine.snapshot()
    table = Table(title="Submitted Data")
    for col in snap.columns:
        table.add_column(col)
    for row in snap.rows:
        table.add_row(*[str(v) for v in row])
    console.print(table)


engine = FormEngine()

engine.select_form_type("paymentInfo")
engine.set_field_value("cardNumber", "4111111111111111")
engine.set_field_value("expiryDate", "2027-04")
engine.set_field_value("cvv", "12")
engine.set_field_value("cardholderName", "Ann Lee")
console.print(f"Progress: {engine.session.progress}%")

try:
    engine.commit()
except ValidationFailed as e:
    for name, message in e.errors.items():
        console.print(f"[red]{name}[/red]: {message}")

engine.set_field_value("cvv", "123")
console.print(engine.commit().message)

engine.begin_edit(0)
engine.set_field_value("cardholderName", "Ann B. Lee")
console.print(engine.commit().message)
show_records(engine)

engine.delete_at(0)
console.print(DELETE_MESSAGE)
show_records(engine)
