"""Date windows, column projection, role filtering, snapshot and ledger access."""
from .columns import HEADER_CONTRACT, SourceKind
from .dates import DateWindow, parse_flexible_date, to_inclusive_window
from .normalize import project, project_many
from .access import filter_rows
from .pagination import paginate
from .store import InventoryStore
from .snapshots import SnapshotQueryService, SnapshotResult, load_delimited
from .ledger import ApprovalEvent, HistoryLedger
