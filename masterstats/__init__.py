"""
MasterStats
===========

Champion mastery statistics for League of Legends summoners.

Features:
- Clean Architecture (Domain → Infrastructure → Application → Presentation)
- Bounded read-through summoner cache with fetch coalescing
- Per-summoner top champions, level/grade/chest distributions
- Region and tier population counts across all cached summoners
"""

__version__ = "1.0.0"
