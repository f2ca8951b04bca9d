from subgen.cli.app import app

app()
