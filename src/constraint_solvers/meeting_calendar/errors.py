class SchedulingInputError(ValueError):
    """Raised when a scheduling problem is malformed. Nothing has been solved yet."""

    pass


class InvalidMeetingCountError(SchedulingInputError):
    """Raised when the number of meetings is not a non-negative integer."""

    pass


class InvalidRangeError(SchedulingInputError):
    """Raised when the date range starts after it ends."""

    pass


class InvalidIndexError(SchedulingInputError):
    """Raised when a constraint references a meeting index outside [0, n)."""

    pass


class InvalidConstraintError(SchedulingInputError):
    """Raised when a constraint is neither unary nor binary, or cannot be parsed."""

    pass


class SearchBudgetExceededError(Exception):
    """Raised when the backtracking search visits more nodes than allowed."""

    def __init__(self, max_nodes: int, nodes_visited: int):
        self.max_nodes = max_nodes
        self.nodes_visited = nodes_visited
        super().__init__(
            f"Search budget of {max_nodes} nodes exceeded after visiting {nodes_visited} nodes"
        )
