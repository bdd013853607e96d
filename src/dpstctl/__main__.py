from dpstctl.cli.cli import main

main()
