"""NiceGUI user interface."""
