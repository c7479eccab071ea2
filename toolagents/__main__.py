from toolagents.cli import main

main()
