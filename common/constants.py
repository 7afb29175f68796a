"""Project-wide constants: role keys, permission action names and REST paths."""

LEADER_FGAC_ROLE: str = "leader_fgac_role"
FOLLOWER_FGAC_ROLE: str = "follower_fgac_role"

LEADER: str = "leader"
FOLLOWER: str = "follower"

AUTOFOLLOW_PATH: str = "/_opendistro/_replication/_autofollow"

# Action names must match the replication plugin's registered transport actions.
AUTOFOLLOW_UPDATE_ACTION = "cluster:admin/plugins/replication/autofollow/update"
SETUP_VALIDATE_ACTION = "indices:admin/plugins/replication/index/setup/validate"
CHANGES_WRITE_ACTION = "indices:data/write/plugins/replication/changes"
CHANGES_READ_ACTION = "indices:data/read/plugins/replication/changes"
FILE_CHUNK_READ_ACTION = "indices:data/read/plugins/replication/file_chunk"
INDEX_START_ACTION = "indices:admin/plugins/replication/index/start"
INDEX_PAUSE_ACTION = "indices:admin/plugins/replication/index/pause"
INDEX_RESUME_ACTION = "indices:admin/plugins/replication/index/resume"
INDEX_STOP_ACTION = "indices:admin/plugins/replication/index/stop"
INDEX_UPDATE_ACTION = "indices:admin/plugins/replication/index/update"
INDEX_STATUS_CHECK_ACTION = "indices:admin/plugins/replication/index/status_check"
