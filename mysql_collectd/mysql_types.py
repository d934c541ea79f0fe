"""Mapping of MySQL status variables to metric names and stat types.

Metric names follow the type / type instance naming of collectd's own
mysql plugin (``mysql_commands/select``, ``threads/running`` etc.), with a
``/`` between the two segments.

"""
from .stats import COUNTER
from .stats import DERIVE
from .stats import GAUGE


# SHOW GLOBAL STATUS variables sharing a prefix; the remainder of the
# variable name becomes the second segment of the metric name.
# Com_stmt_* are excluded from the Com_ prefix.
status_prefixes = (
    ("Com_", "mysql_commands/", COUNTER),
    ("Handler_", "mysql_handler/", COUNTER),
    ("Table_locks_", "mysql_locks/", COUNTER),
    ("Select_", "mysql_select/", COUNTER),
    ("Sort_", "mysql_sort/", COUNTER),
)

status_excluded_prefixes = ("Com_stmt_",)

status_variables = {
    "Qcache_hits": ("cache_result/qcache-hits", DERIVE),
    "Qcache_inserts": ("cache_result/qcache-inserts", DERIVE),
    "Qcache_not_cached": ("cache_result/qcache-not_cached", DERIVE),
    "Qcache_lowmem_prunes": ("cache_result/qcache-prunes", DERIVE),
    "Qcache_queries_in_cache": ("cache_size/qcache", GAUGE),
    "Bytes_received": ("mysql_octets/rx", GAUGE),
    "Bytes_sent": ("mysql_octets/tx", GAUGE),
    "Threads_running": ("threads/running", GAUGE),
    "Threads_connected": ("threads/connected", GAUGE),
    "Threads_cached": ("threads/cached", GAUGE),
    "Threads_created": ("total_threads/created", DERIVE),
}

# SHOW GLOBAL STATUS variables that are only reported when InnoDB stats
# are enabled
innodb_status_variables = {
    "Innodb_buffer_pool_pages_data": ("mysql_bpool_pages/data", GAUGE),
    "Innodb_buffer_pool_pages_dirty": ("mysql_bpool_pages/dirty", GAUGE),
    "Innodb_buffer_pool_pages_flushed": (
        "mysql_bpool_counters/pages_flushed",
        COUNTER,
    ),
    "Innodb_buffer_pool_pages_free": ("mysql_bpool_pages/free", GAUGE),
    "Innodb_buffer_pool_pages_misc": ("mysql_bpool_pages/misc", GAUGE),
    "Innodb_buffer_pool_pages_total": ("mysql_bpool_pages/total", GAUGE),
    "Innodb_buffer_pool_read_ahead_rnd": (
        "mysql_bpool_counters/read_ahead_rnd",
        COUNTER,
    ),
    "Innodb_buffer_pool_read_ahead": (
        "mysql_bpool_counters/read_ahead",
        COUNTER,
    ),
    "Innodb_buffer_pool_read_ahead_evicted": (
        "mysql_bpool_counters/read_ahead_evicted",
        COUNTER,
    ),
    "Innodb_buffer_pool_read_requests": (
        "mysql_bpool_counters/read_requests",
        COUNTER,
    ),
    "Innodb_buffer_pool_reads": ("mysql_bpool_counters/reads", COUNTER),
    "Innodb_buffer_pool_write_requests": (
        "mysql_bpool_counters/write_requests",
        COUNTER,
    ),
    "Innodb_buffer_pool_bytes_data": ("mysql_bpool_bytes/data", GAUGE),
    "Innodb_buffer_pool_bytes_dirty": ("mysql_bpool_bytes/dirty", GAUGE),
    "Innodb_data_fsyncs": ("mysql_innodb_data/fsyncs", COUNTER),
    "Innodb_data_read": ("mysql_innodb_data/read", COUNTER),
    "Innodb_data_reads": ("mysql_innodb_data/reads", COUNTER),
    "Innodb_data_writes": ("mysql_innodb_data/writes", COUNTER),
    "Innodb_data_written": ("mysql_innodb_data/written", COUNTER),
    "Innodb_dblwr_writes": ("mysql_innodb_dblwr/writes", COUNTER),
    "Innodb_dblwr_pages_written": ("mysql_innodb_dblwr/written", COUNTER),
    "Innodb_log_waits": ("mysql_innodb_log/waits", COUNTER),
    "Innodb_log_write_requests": ("mysql_innodb_log/write_requests", COUNTER),
    "Innodb_log_writes": ("mysql_innodb_log/writes", COUNTER),
    "Innodb_os_log_fsyncs": ("mysql_innodb_log/fsyncs", COUNTER),
    "Innodb_os_log_written": ("mysql_innodb_log/written", COUNTER),
    "Innodb_pages_created": ("mysql_innodb_pages/created", COUNTER),
    "Innodb_pages_read": ("mysql_innodb_pages/read", COUNTER),
    "Innodb_pages_written": ("mysql_innodb_pages/written", COUNTER),
    "Innodb_row_lock_time": ("mysql_innodb_row_lock/time", COUNTER),
    "Innodb_row_lock_waits": ("mysql_innodb_row_lock/waits", COUNTER),
    "Innodb_rows_deleted": ("mysql_innodb_rows/deleted", COUNTER),
    "Innodb_rows_inserted": ("mysql_innodb_rows/inserted", COUNTER),
    "Innodb_rows_read": ("mysql_innodb_rows/read", COUNTER),
    "Innodb_rows_updated": ("mysql_innodb_rows/updated", COUNTER),
}


def _innodb_metrics(prefix, type_, *names):
    return {name: (prefix + name, type_) for name in names}


# rows of information_schema.innodb_metrics
innodb_metrics = {
    **_innodb_metrics(
        "bytes/",
        GAUGE,
        "metadata_mem_pool_size",
        "buffer_pool_size",
        "ibuf_size",
    ),
    **_innodb_metrics(
        "mysql_locks/",
        DERIVE,
        "lock_deadlocks",
        "lock_timeouts",
        "lock_row_lock_current_waits",
    ),
    **_innodb_metrics(
        "gauge/",
        GAUGE,
        "buffer_pool_pages_total",
        "buffer_pool_pages_misc",
        "buffer_pool_pages_data",
        "buffer_pool_bytes_data",
        "buffer_pool_pages_dirty",
        "buffer_pool_bytes_dirty",
        "buffer_pool_pages_free",
        "trx_rseg_history_len",
        "file_num_open_files",
        "innodb_activity_count",
        "innodb_dblwr_page_size",
    ),
    **_innodb_metrics(
        "operations/",
        DERIVE,
        "buffer_pool_reads",
        "buffer_pool_read_requests",
        "buffer_pool_write_requests",
        "buffer_pool_wait_free",
        "buffer_pool_read_ahead",
        "buffer_pool_read_ahead_evicted",
        "buffer_pages_created",
        "buffer_pages_written",
        "buffer_pages_read",
        "buffer_data_reads",
        "buffer_data_written",
        "os_data_reads",
        "os_data_writes",
        "os_data_fsyncs",
        "os_log_bytes_written",
        "os_log_fsyncs",
        "os_log_pending_fsyncs",
        "os_log_pending_writes",
        "log_waits",
        "log_write_requests",
        "log_writes",
        "adaptive_hash_searches",
        "ibuf_merges_insert",
        "ibuf_merges_delete_mark",
        "ibuf_merges_delete",
        "ibuf_merges_discard_insert",
        "ibuf_merges_discard_delete_mark",
        "ibuf_merges_discard_delete",
        "ibuf_merges_discard_merges",
        "innodb_dblwr_writes",
        "innodb_dblwr_pages_written",
        "innodb_rwlock_s_spin_waits",
        "innodb_rwlock_x_spin_waits",
        "innodb_rwlock_s_spin_rounds",
        "innodb_rwlock_x_spin_rounds",
        "innodb_rwlock_s_os_waits",
        "innodb_rwlock_x_os_waits",
        "dml_reads",
        "dml_inserts",
        "dml_deletes",
        "dml_updates",
    ),
}

# SHOW MASTER STATUS column
master_columns = {
    "Position": ("mysql_log_position/master-bin", COUNTER),
}

# SHOW SLAVE STATUS columns
slave_columns = {
    "Read_Master_Log_Pos": ("mysql_log_position/slave-read", COUNTER),
    "Exec_Master_Log_Pos": ("mysql_log_position/slave-exec", COUNTER),
    "Seconds_Behind_Master": ("mysql_log_position/time_offset", GAUGE),
}

# SHOW SLAVE STATUS has at least this many columns on any server version
# that reports the columns above
SLAVE_STATUS_MIN_COLUMNS = 33
