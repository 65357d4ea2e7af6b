from facility_report import cli

cli.app()
