from seedfuzz.cli import main

main()
