from playhouse.db_url import connect

from infrastructure.config import get_settings

# Por defecto SQLite (DATABASE_URL=sqlite:///tasks.db)
db = connect(get_settings().database_url)
