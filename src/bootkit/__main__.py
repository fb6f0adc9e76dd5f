from bootkit.cli import cli

cli(prog_name="bootkit")
