from md2kindle.main import main

main()
