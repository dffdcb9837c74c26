from lishp.types.expression import Expression, Call, List, Atom
from lishp.types.function import Function
from lishp.types.state import State
from lishp.types.tail_call import TailCall
