"""
Introspection of the methods a L{typing.Protocol} actually declares.
"""

from __future__ import annotations

from inspect import getmembers, isfunction
from typing import TYPE_CHECKING, Protocol

emptyProtocolMethods: frozenset[str]
if not TYPE_CHECKING:
    emptyProtocolMethods = frozenset(
        name
        for name, each in getmembers(type("Example", tuple([Protocol]), {}), isfunction)
    )


def actuallyDefinedProtocolMethods(protocol: object) -> frozenset[str]:
    """
    Attempt to ignore implementation details, and get all the methods that the
    protocol actually defines.

    that includes locally defined methods and also those defined in inherited
    superclasses.
    """
    return (
        frozenset(name for name, each in getmembers(protocol, isfunction))
        - emptyProtocolMethods
    )


def checkMembership(protocol: type, name: str) -> None:
    """
    Ensure that C{name} is a method declared by C{protocol}, not just some
    string that happens to look like one.
    """
    if name not in actuallyDefinedProtocolMethods(protocol):
        raise ValueError(
            f"{name} is not a member of {protocol.__module__}.{protocol.__name__}"
        )
