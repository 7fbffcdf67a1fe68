"""JavaScript object model with own-symbol enumeration."""

# Coercion
from jsreflect.coerce import to_object as to_object

# Descriptors
from jsreflect.descriptor import MISSING as MISSING
from jsreflect.descriptor import PropertyDescriptor as PropertyDescriptor
from jsreflect.descriptor import from_property_descriptor as from_property_descriptor
from jsreflect.descriptor import to_property_descriptor as to_property_descriptor

# Configuration
from jsreflect.env import env as env

# Errors
from jsreflect.errors import ConversionError as ConversionError
from jsreflect.errors import JSError as JSError
from jsreflect.errors import JSTypeError as JSTypeError
from jsreflect.errors import ProxyInvariantError as ProxyInvariantError
from jsreflect.errors import RevokedProxyError as RevokedProxyError
from jsreflect.errors import ValidationError as ValidationError

# Key enumeration
from jsreflect.keys import FilterMode as FilterMode
from jsreflect.keys import filter_mode as filter_mode
from jsreflect.keys import select_names as select_names
from jsreflect.keys import select_symbols as select_symbols

# Object builtins
from jsreflect.object import Object as Object
from jsreflect.object import create as create
from jsreflect.object import define_properties as define_properties
from jsreflect.object import define_property as define_property
from jsreflect.object import get_own_property_descriptor as get_own_property_descriptor
from jsreflect.object import get_own_property_names as get_own_property_names
from jsreflect.object import get_own_property_symbols as get_own_property_symbols
from jsreflect.object import symbols as symbols

# Objects
from jsreflect.objects import BooleanObject as BooleanObject
from jsreflect.objects import JSObject as JSObject
from jsreflect.objects import MappingObject as MappingObject
from jsreflect.objects import NumberObject as NumberObject
from jsreflect.objects import OrdinaryObject as OrdinaryObject
from jsreflect.objects import StringObject as StringObject
from jsreflect.objects import SymbolObject as SymbolObject

# Proxies
from jsreflect.proxy import Proxy as Proxy
from jsreflect.proxy import ProxyObject as ProxyObject
from jsreflect.proxy import revocable as revocable

# Values
from jsreflect.values import PropertyKey as PropertyKey
from jsreflect.values import Symbol as Symbol
from jsreflect.values import Undefined as Undefined
from jsreflect.values import to_property_key as to_property_key
