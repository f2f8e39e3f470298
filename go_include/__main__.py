from go_include.main import main

if __name__ == "__main__":
    raise SystemExit(main())
