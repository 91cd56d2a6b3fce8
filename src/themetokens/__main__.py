from themetokens.cli import main

main()
