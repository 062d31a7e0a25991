import sqlite3
from typing import List, Optional


def init_db(db_path: str = "directory.db") -> None:
    """Initialize database with all required tables."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS users (
                user_id INTEGER PRIMARY KEY AUTOINCREMENT,
                name VARCHAR(100) NOT NULL,
                email VARCHAR(255) NOT NULL,
                address VARCHAR(255) NOT NULL DEFAULT '',
                phone_country_code VARCHAR(8) NOT NULL DEFAULT '',
                phone_number VARCHAR(32) NOT NULL DEFAULT '',
                document_photo VARCHAR(1024) NULL,      -- S3 key of the profile photo
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()
    finally:
        conn.close()


def add_user(name: str,
             email: str,
             address: str = "",
             phone_country_code: str = "",
             phone_number: str = "",
             document_photo: Optional[str] = None,
             db_path: str = "directory.db") -> int:
    """Insert a user and return the new user_id."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO users
            (name, email, address, phone_country_code, phone_number, document_photo)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (name, email, address, phone_country_code, phone_number, document_photo))

        user_id = cursor.lastrowid
        conn.commit()
        return user_id
    finally:
        conn.close()


def get_user(user_id: int, db_path: str = "directory.db") -> Optional[dict]:
    """Retrieve one user row as a dict, or None."""
    conn = sqlite3.connect(db_path)
    try:
        # Set row_factory to get dictionary-like results
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute('SELECT * FROM users WHERE user_id = ?', (user_id,))

        row = cursor.fetchone()
        if row:
            return dict(row)
        return None
    finally:
        conn.close()


def list_users(db_path: str = "directory.db") -> List[dict]:
    """All users, alphabetically by name."""
    conn = sqlite3.connect(db_path)
    try:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute('SELECT * FROM users ORDER BY name COLLATE NOCASE, user_id')
        return [dict(row) for row in cursor.fetchall()]
    finally:
        conn.close()


def update_user_photo(user_id: int, document_photo: Optional[str], db_path: str = "directory.db") -> bool:
    """Point a user at a new photo key. Returns False if the user does not exist."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(
            'UPDATE users SET document_photo = ? WHERE user_id = ?',
            (document_photo, user_id),
        )
        conn.commit()
        return cursor.rowcount > 0
    finally:
        conn.close()


def delete_user(user_id: int, db_path: str = "directory.db") -> bool:
    """Remove a user. Returns False if the user does not exist."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute('DELETE FROM users WHERE user_id = ?', (user_id,))
        conn.commit()
        return cursor.rowcount > 0
    finally:
        conn.close()
