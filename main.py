from md2kindle.main import main

if __name__ == "__main__":
    main()
