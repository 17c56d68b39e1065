"""Tk front-end for Outline Navigator."""
