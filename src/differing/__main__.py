from differing.cli import main

main()
