from cct.cli.main import app

app()
