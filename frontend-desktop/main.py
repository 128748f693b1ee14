"""
Launcher for the PyQt5 desktop client.

Set SEVERITY_API_URL if the backend is not on http://127.0.0.1:3000.
"""
from severity_desktop.app import main


if __name__ == "__main__":
    main()
