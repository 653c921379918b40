"""Type hints used in Court Pairing."""

from typing import Dict, FrozenSet, List, Literal, Tuple

# Participants are numbered from 1 at tournament creation
ParticipantId = int
# Two teammates, by id
PairIds = Tuple[ParticipantId, ParticipantId]
# All teammate pairs for one round
PairList = List[PairIds]
# Unordered key for a partnership
PartnershipKey = FrozenSet[ParticipantId]
# Raw partnership counts
PartnershipCounts = Dict[PartnershipKey, int]
# (team A score, team B score)
Score = Tuple[int, int]

ScoringRule = Literal["games", "match_points"]

#  LocalWords:  PairIds PartnershipKey
