from atomicfile.cli.app import main

main()
