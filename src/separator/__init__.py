"""Image Separator – cut each foreground object of an image into its own PNG."""

__version__ = "0.1.0"
