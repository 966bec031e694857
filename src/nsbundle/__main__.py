from nsbundle.cli import main

main()
