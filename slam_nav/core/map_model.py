from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple


if TYPE_CHECKING:
    from slam_nav.core.occupancy_grid import OccupancyGrid
    from slam_nav.core.visited_map import VisitedMap

Coord = Tuple[int, int]  # (x, y)


def coord_to_key(pos: Coord, width: int) -> int:
    """坐标 → 整数键 y*W+x（单射）"""
    return pos[1] * width + pos[0]


def key_to_coord(key: int, width: int) -> Coord:
    """整数键 → 坐标 (x, y)"""
    y, x = divmod(key, width)
    return (x, y)


class SearchState(Enum):
    SEARCHING = "searching"
    GOAL_REACHED = "goal_reached"
    EXHAUSTED = "exhausted"


@dataclass
class PlanRequest:
    start: Coord
    goal: Coord
    algorithm: Optional[str] = None   # None = 使用配置中的算法
    despeckle: Optional[bool] = None  # None = 使用配置中该算法的默认值


@dataclass
class PlanResult:
    ok: bool
    path: List[Coord]
    reason: str = ""
    state: SearchState = SearchState.EXHAUSTED
    visited: Optional["VisitedMap"] = None
    cost: Optional[float] = None           # 终点代价（已扣除起点 epsilon）
    nodes_expanded: int = 0
    stale_pops: int = 0
    grid: Optional["OccupancyGrid"] = field(default=None, repr=False)  # 实际搜索的栅格
