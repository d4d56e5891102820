from src.link_validation.validate import main

# python -m src.link_validation
if __name__ == "__main__":
    raise SystemExit(main())
