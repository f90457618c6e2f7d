"""
Dummy Data Generator - Mock CSV for MySQL import tests
=======================================================
Grows a mock CSV by resampling its own rows.

Sampled rows keep their other columns (gender, etc.) but get a fresh id and
identity columns derived from that id, so the output can be loaded into a
table with a primary key on `id` and unique emails.
"""

import numpy as np
import pandas as pd
from typing import Optional

from dbrunbook.config import DEFAULT_SEED

DEFAULT_COLUMNS = {
    'id': 'id',
    'firstname': 'firstname',
    'lastname': 'lastname',
    'email': 'email',
    'ipaddress': 'ipaddress',
}

FIRST_NAMES = ['Anna', 'Ravi', 'Priya', 'John', 'Meera', 'Arjun', 'Sara',
               'Kiran', 'Liam', 'Neha', 'Omar', 'Chen', 'Maya', 'Vikram']
LAST_NAMES = ['Sharma', 'Smith', 'Patel', 'Nair', 'Garcia', 'Iyer', 'Khan',
              'Brown', 'Reddy', 'Wang', 'Das', 'Lopez', 'Menon', 'Singh']
GENDERS = ['Male', 'Female', 'Non-binary']


def ip_from_id(row_id: int) -> str:
    """Map an id to a stable address inside 10.0.0.0/8."""
    return f"10.{(row_id >> 16) & 255}.{(row_id >> 8) & 255}.{row_id & 255}"


def sequential_values(ids) -> dict:
    """Identity columns for new rows, keyed by logical field name."""
    ids = [int(i) for i in ids]
    return {
        'id': ids,
        'email': [f"user{i}@example.com" for i in ids],
        'firstname': [f"First{i}" for i in ids],
        'lastname': [f"Last{i}" for i in ids],
        'ipaddress': [ip_from_id(i) for i in ids],
    }


def resolve_columns(columns: Optional[dict] = None) -> dict:
    resolved = dict(DEFAULT_COLUMNS)
    if columns:
        unknown = set(columns) - set(DEFAULT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown column keys: {sorted(unknown)}")
        resolved.update(columns)
    return resolved


class DummyDataGenerator:
    """Appends resampled rows with sequential identities to a DataFrame."""

    def __init__(self, n_rows: int, seed: int = DEFAULT_SEED, columns: Optional[dict] = None):
        """
        Args:
            n_rows: Number of rows to append
            seed: Random state used for sampling
            columns: Overrides for DEFAULT_COLUMNS (logical name -> CSV header)
        """
        if n_rows < 0:
            raise ValueError(f"n_rows must be >= 0, got {n_rows}")
        self.n_rows = n_rows
        self.seed = seed
        self.columns = resolve_columns(columns)

    def _check_input(self, df: pd.DataFrame):
        missing = [col for col in self.columns.values() if col not in df.columns]
        if missing:
            raise ValueError(f"Missing required column(s): {', '.join(missing)}")

        # a header-only CSV reads back with object dtype
        if df.empty:
            if self.n_rows > 0:
                raise ValueError("Cannot sample rows from an empty dataset")
            return

        id_col = self.columns['id']
        if not pd.api.types.is_integer_dtype(df[id_col]):
            raise ValueError(f"Column '{id_col}' must contain integers")

    def generate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return the input rows followed by n_rows new ones."""
        self._check_input(df)

        if self.n_rows == 0:
            return df.copy().reset_index(drop=True)

        # 1. Sample with replacement
        sampled = df.sample(n=self.n_rows, replace=True, random_state=self.seed)
        sampled = sampled.reset_index(drop=True)

        # 2. Sequential ids after the current maximum
        start = int(df[self.columns['id']].max()) + 1
        new_ids = np.arange(start, start + self.n_rows)

        # 3. Overwrite identity columns
        for field, values in sequential_values(new_ids).items():
            sampled[self.columns[field]] = values

        # 4. Append after the originals
        result = pd.concat([df, sampled[df.columns]], ignore_index=True)
        result[self.columns['id']] = result[self.columns['id']].astype('int64')
        return result

    def validate_dataset(self, df: pd.DataFrame, original_rows: int) -> dict:
        id_col = self.columns['id']
        email_col = self.columns['email']

        return {
            'n_rows': len(df),
            'added_rows': len(df) - original_rows,
            'unique_ids': int(df[id_col].nunique()),
            'duplicate_ids': int(df[id_col].duplicated().sum()),
            'duplicate_emails': int(df[email_col].duplicated().sum()),
        }


def add_dummy_data(input_path, output_path, n_rows: int, seed: int = DEFAULT_SEED,
                   columns: Optional[dict] = None) -> pd.DataFrame:
    """Read a CSV, append n_rows dummy rows and write the result."""
    df = pd.read_csv(input_path)
    print(f"[OK] Loaded {input_path}: {len(df)} rows, {len(df.columns)} columns")

    generator = DummyDataGenerator(n_rows=n_rows, seed=seed, columns=columns)
    result = generator.generate(df)

    stats = generator.validate_dataset(result, original_rows=len(df))
    print(f"   - Rows: {stats['n_rows']} (+{stats['added_rows']})")
    print(f"   - Duplicate ids: {stats['duplicate_ids']}")
    print(f"   - Duplicate emails: {stats['duplicate_emails']}")

    result.to_csv(output_path, index=False)
    print(f"[SAVE] Dataset saved: {output_path}")
    return result


def generate_seed_csv(path, n_rows: int, seed: int = DEFAULT_SEED) -> pd.DataFrame:
    """Write a Mockaroo-style seed file with random names."""
    if n_rows < 1:
        raise ValueError(f"n_rows must be >= 1, got {n_rows}")

    rng = np.random.default_rng(seed)
    ids = np.arange(1, n_rows + 1)
    firstnames = rng.choice(FIRST_NAMES, n_rows)
    lastnames = rng.choice(LAST_NAMES, n_rows)

    df = pd.DataFrame({
        'id': ids,
        'firstname': firstnames,
        'lastname': lastnames,
        'email': [f"{first.lower()}.{last.lower()}{i}@mail.test"
                  for first, last, i in zip(firstnames, lastnames, ids)],
        'gender': rng.choice(GENDERS, n_rows, p=[0.48, 0.48, 0.04]),
        'ipaddress': [".".join(str(o) for o in octets)
                      for octets in rng.integers(1, 255, size=(n_rows, 4))],
    })

    df.to_csv(path, index=False)
    print(f"[SAVE] Seed file saved: {path} ({n_rows} rows)")
    return df
