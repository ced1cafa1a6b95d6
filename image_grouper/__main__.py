from image_grouper.cli import main_cli

main_cli()
