"""
modstage - ephemeral version tags for module publishing workflows

modstage wraps a remote git client so a version can be staged locally
(assigned a semantic version pointing at a commit) before it is tagged
upstream. Remote tags always take precedence over staged ones.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
