from inkvault.core.cli import main

main()
