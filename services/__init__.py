# Import the services for easier access
from .ambient_cache import DiscordAmbientCache, StaticAmbientCache
from .ambient_snapshot import AmbientSnapshotService, AmbientSnapshotTimer

__all__ = ['DiscordAmbientCache', 'StaticAmbientCache', 'AmbientSnapshotService', 'AmbientSnapshotTimer']
