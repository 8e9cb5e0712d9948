from pathlib import Path
from starlette.config import Config
from ..engine import MAX

config = Config('.env' if Path('.env').is_file() else None)
DEBUG = config('DEBUG', cast=bool, default=False)
TYPE_FIELD = config('TYPE_FIELD', default='dtype_s')
WILDCARDED = config('WILDCARDED', cast=bool, default=True)
MAX_ROWS = config('MAX_ROWS', cast=int, default=MAX)
