from .BIT.FenwickTree import FenwickTree, StrictFenwickTree
from .CSV.loader import IngestError, IngestReport, load_csv_batch, parse_csv_row
