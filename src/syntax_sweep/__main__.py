from syntax_sweep.cli import main

main()
