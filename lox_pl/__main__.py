from .lox import main

main()
