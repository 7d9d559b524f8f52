"""SQLite access for each kind of record."""