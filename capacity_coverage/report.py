from tabulate import tabulate

from capacity_coverage.views import Projection


def render_table(projection: Projection, tablefmt: str = "grid") -> str:
    """One-shot console rendering of a projection"""
    if not projection.rows:
        return f"{projection.title}\n(no rows)"
    table = tabulate(
        projection.rows,
        headers=projection.header,
        tablefmt=tablefmt,
        stralign="left",
        disable_numparse=True,
    )
    return f"{projection.title}\n{table}"
