# -*- coding: utf-8 -*-
"""
Execution of validated GraphQL documents on top of :mod:`asyncio`.
"""

# flake8: noqa

from .default_resolver import default_resolver, default_type_resolver
from .execute import execute
from .executor import Executor
from .get_operation import get_operation, get_operation_with_type
from .wrappers import ExecutionContext, GraphQLResult, ResolveInfo, ResponsePath
