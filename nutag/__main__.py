from nutag.cli import main

main()
