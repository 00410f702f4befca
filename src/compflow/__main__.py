from compflow.main import cli

cli()
