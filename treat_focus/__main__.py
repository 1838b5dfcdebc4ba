from .app import TreatFocusApp


def main() -> None:
    TreatFocusApp().run()


if __name__ == "__main__":
    main()
