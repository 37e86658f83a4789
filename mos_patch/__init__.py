# mos_patch/__init__.py
__version__ = "2.0.0"
