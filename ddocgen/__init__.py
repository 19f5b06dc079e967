"""
ddocgen — documentation macro renderer.

Loads NAME = VALUE macro tables and expands $(NAME args...) invocations
in documentation text.
"""

__version__ = "0.3.0"
