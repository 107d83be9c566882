# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:38:55
# @Author : Kariko Lin

from .consts import (
    DEFAULT_MACRO_PATTERN,
    DEFAULT_RESOLUTION_POLICY,
    PropsTag,
    ResolutionPolicy
)
from .resolver import (
    MacroResolver,
    ResolutionResult,
    default_macro_pattern,
    set_default_macro_pattern
)
from .model import MissingPropertyError, PropertyStore, property_key
from .compose import (
    UnknownPropertySetError,
    create_property_stores,
    derive_store
)
