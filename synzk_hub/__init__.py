"""
SYNZK Hub - backend for cross-chain swap requests.

Provides REST endpoints for:
- Creating swap requests
- Looking up swap status
- Listing recent swaps
- Advancing a swap's status manually (dev helper)
- Health checks
"""

__version__ = "0.1.0"
