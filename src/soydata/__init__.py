"""
Soy Template Data Values

Dynamic values that template expressions operate on, and the conversion of
native Python data into them.
"""

__version__ = "0.1.0"


from ._error import *
from ._value import *
from ._lift import *
from ._parse import *
