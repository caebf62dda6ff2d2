"""A layered raster paint editor: drawing model, project format, start menu and Tk window."""

__version__ = "0.1.0"