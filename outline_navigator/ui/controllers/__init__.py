"""UI controllers package for Outline Navigator.

Controllers mediate between the Tk widgets and the core model/services and
contain no toolkit code.
"""

from .outline_controller import OutlineController  # noqa: F401

__all__: list[str] = ["OutlineController"]
