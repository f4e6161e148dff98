from __future__ import annotations

import importlib.metadata

__path__ = __import__("pkgutil").extend_path(__path__, __name__)
__version__ = importlib.metadata.version("overcall")

from overcall.descriptors import Binding, MemberDescriptor, MemberKind, array_type
from overcall.errors import DispatchError, InvocationError, MemberNotFoundError
from overcall.hosts import Host
from overcall.hosts.python import PythonHost
from overcall.hosts.table import TableHost
from overcall.overloads import OverloadMeta, OverloadSet, overload
from overcall.resolvers import OverloadResolver, default_resolver

# Export all interfaces.
__all__ = [
    "Binding",
    "DispatchError",
    "Host",
    "InvocationError",
    "MemberDescriptor",
    "MemberKind",
    "MemberNotFoundError",
    "OverloadMeta",
    "OverloadResolver",
    "OverloadSet",
    "PythonHost",
    "TableHost",
    "array_type",
    "default_resolver",
    "invoke_class_method",
    "invoke_constructor",
    "invoke_instance_method",
    "overload",
]

invoke_constructor = default_resolver.invoke_constructor
invoke_class_method = default_resolver.invoke_class_method
invoke_instance_method = default_resolver.invoke_instance_method
