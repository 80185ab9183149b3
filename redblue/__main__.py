from redblue.pipeline import main

main()
