from chess3d.app import main

main()
