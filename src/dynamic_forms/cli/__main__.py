from dynamic_forms.cli import app

app()
