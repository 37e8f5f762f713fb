from quire.cli.app import app

app()
