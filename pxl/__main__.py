from pxl.cli import main

main()
