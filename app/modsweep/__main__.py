from modsweep.cli.main import app

app(prog_name="modsweep")
