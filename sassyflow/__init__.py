"""SassyFlow - save-triggered SCSS build pipeline."""

__version__ = "0.1.0"
