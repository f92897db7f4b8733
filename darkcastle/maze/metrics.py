from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'corridors_carved': 0,
        'branches_spawned': 0,
        'edge_stops': 0,
        'max_branch_depth': 0,
        'rooms': 0,
        'links': 0,
        'dead_ends': 0,
        'runtime_ms': 0.0,
    }
