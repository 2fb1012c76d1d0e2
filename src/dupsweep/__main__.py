from dupsweep.cli import main

main()
