"""
Protection coordination audit package.

- coordination: Pairwise miscoordination and tight margin detection
- recommendations: Rule table of settings recommendations

Usage:
    from prot_audit import check_coordination
    warnings = check_coordination(devices, substation, 'fuse-saving')
"""

from prot_audit.coordination import check_coordination
from prot_audit.recommendations import (
    generate_recommendations,
    philosophy_lookup,
    RULE_TABLE,
    FUSE_UPGRADES,
    FUSE_DOWNGRADES,
)

__all__ = [
    # coordination
    'check_coordination',
    # recommendations
    'generate_recommendations',
    'philosophy_lookup',
    'RULE_TABLE',
    'FUSE_UPGRADES',
    'FUSE_DOWNGRADES',
]
