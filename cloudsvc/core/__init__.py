# cloudsvc/core/__init__.py
