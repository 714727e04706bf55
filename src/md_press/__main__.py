from md_press.cli import app

app()
