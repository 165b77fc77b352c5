from backend.engine.gameopponent.opponent import Opponent, choose_move
from backend.engine.gameopponent.regions import Region, RegionPolicy, analyze, region_bonus

__all__ = ["Opponent", "Region", "RegionPolicy", "analyze", "choose_move", "region_bonus"]
