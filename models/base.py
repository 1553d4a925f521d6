from pydantic import BaseModel, ConfigDict
from typing import Iterable, List


class BaseGolfModel(BaseModel):
    """Shared configuration for every record model."""
    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)


def unique_ids(ids: Iterable[str]) -> List[str]:
    """Drop repeated ids, keeping the first occurrence of each."""
    seen = set()
    result = []
    for player_id in ids:
        if player_id not in seen:
            seen.add(player_id)
            result.append(player_id)
    return result
