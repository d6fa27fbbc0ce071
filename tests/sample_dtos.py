#!/usr/bin/env python3
"""
Shared DataTransferObject fixtures for the test-suite.

Defined at module level so their annotations resolve in this module's
namespace and their qualified names are stable (`sample_dtos.<Name>`).
"""
from typing import ClassVar, Optional

from strictdto import DataTransferObject, field


class DummyClass:
    pass


class OtherClass:
    pass


class NestedChild(DataTransferObject):
    name: str


class NestedParent(DataTransferObject):
    name: str
    child: NestedChild


class NestedParentOfMany(DataTransferObject):
    name: str
    children: list[NestedChild]


class EmptyChild(DataTransferObject):
    pass


class TestDataTransferObject(DataTransferObject):
    __test__ = False  # not a pytest test class

    testProperty: int


class Node(DataTransferObject):
    name: str
    child: "Optional[Node]" = None


class WithDefaults(DataTransferObject):
    foo: str = "abc"
    bar: bool
    tags: list[str] = field(default_factory=list)
    scores: dict[str, int] = {"base": 1}


class WithAlias(DataTransferObject):
    name: str = field(alias="Name")


class WithClassVar(DataTransferObject):
    foo: str
    prop: ClassVar[Optional[str]] = None


class Base(DataTransferObject):
    id: int
    label: str = "base"


class Derived(Base):
    label: str = "derived"
    extra: Optional[bool] = None
