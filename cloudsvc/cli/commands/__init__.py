# cloudsvc/cli/commands/__init__.py
