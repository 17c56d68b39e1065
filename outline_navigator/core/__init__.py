"""Core, UI-independent building blocks of Outline Navigator."""
