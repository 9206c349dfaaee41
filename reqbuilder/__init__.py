"""
reqbuilder - Interactive HTTP request builder and tester.

Edit method, URL, query parameters, headers and body, send the request over
async httpx, inspect the normalized result and export the request as a
reusable JSON configuration.
"""

from .exceptions import (
    ReqBuilderConfigError,
    ReqBuilderDispatchError,
    ReqBuilderError,
    ShellCommandError,
)

__all__ = [
    "__version__",
    "ReqBuilderConfigError",
    "ReqBuilderDispatchError",
    "ReqBuilderError",
    "ShellCommandError",
]

__version__ = "1.0.0"
