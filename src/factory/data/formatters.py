import pandas as pd

from constraint_solvers.meeting_calendar.domain import (
    BinaryConstraint,
    MeetingProblem,
    SolveResult,
    UnaryConstraint,
)


def schedule_to_dataframe(problem: MeetingProblem, result: SolveResult) -> pd.DataFrame:
    """
    Convert a solved schedule to a pandas DataFrame, one row per meeting.

    Args:
        problem (MeetingProblem): The problem that was solved.
        result (SolveResult): The solver outcome.

    Returns:
        pd.DataFrame: Columns Meeting, Name, Date, Weekday. Empty when there is
        no solution.
    """
    columns = ["Meeting", "Name", "Date", "Weekday"]
    if not result.is_solved:
        return pd.DataFrame(columns=columns)

    data: list[dict] = []
    for meeting, day in enumerate(result.schedule):
        data.append(
            {
                "Meeting": meeting,
                "Name": problem.name_of(meeting),
                "Date": day,
                "Weekday": day.strftime("%A"),
            }
        )

    return pd.DataFrame(data, columns=columns)


def constraints_to_dataframe(problem: MeetingProblem) -> pd.DataFrame:
    """
    Convert the constraints of a problem to a pandas DataFrame.

    Args:
        problem (MeetingProblem): The problem.

    Returns:
        pd.DataFrame: Columns Kind, Left, Operator, Right.
    """
    data: list[dict[str, str]] = []

    for constraint in problem.constraints:
        match constraint:
            case UnaryConstraint():
                data.append(
                    {
                        "Kind": "unary",
                        "Left": problem.name_of(constraint.meeting),
                        "Operator": constraint.op.value,
                        "Right": constraint.reference.isoformat(),
                    }
                )

            case BinaryConstraint():
                data.append(
                    {
                        "Kind": "binary",
                        "Left": problem.name_of(constraint.left),
                        "Operator": constraint.op.value,
                        "Right": problem.name_of(constraint.right),
                    }
                )

    return pd.DataFrame(data, columns=["Kind", "Left", "Operator", "Right"])
