from face_overlay.ui.app import main


if __name__ == "__main__":
    main()
