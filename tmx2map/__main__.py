from tmx2map.cli import main

main()
