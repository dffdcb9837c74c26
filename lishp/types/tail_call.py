from lishp.types.expression import Expression


class TailCall:
    """A substituted function body still waiting to be evaluated by the trampoline."""

    __slots__ = ("body",)

    def __init__(self, body: Expression):
        self.body = body
