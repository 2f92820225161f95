"""Custom column types."""

import json
from typing import List, Optional

from sqlalchemy import Text, TypeDecorator


class StringListType(TypeDecorator):
    """
    Store a list of strings as JSON text, the same on every dialect.
    """

    cache_ok = True
    impl = Text

    def process_bind_param(self, value: Optional[List[str]], dialect):
        if value is None:
            return None
        return json.dumps([str(v) for v in value], ensure_ascii=False)

    def process_result_value(self, value, dialect) -> Optional[List[str]]:
        if value is None:
            return None
        return [str(v) for v in json.loads(value)]
