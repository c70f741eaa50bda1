from roborate.cli.main import app

app(prog_name="roborate")
