from datamapper.cli import app

app(prog_name="datamapper")
