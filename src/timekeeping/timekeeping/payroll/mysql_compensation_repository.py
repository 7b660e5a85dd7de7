from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Compensation
from .repository import CompensationRepository


class MySQLCompensationRepository(CompensationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee(self, employee_id: int) -> Optional[Compensation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, basic_salary, house_rent_allowance, special_allowance,
                       employee_pf, employee_esi, professional_tax, income_tax
                FROM compensation
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Compensation(
                employee_id=int(r["employee_id"]),
                basic_salary=Decimal(r["basic_salary"] or 0),
                house_rent_allowance=Decimal(r["house_rent_allowance"] or 0),
                special_allowance=Decimal(r["special_allowance"] or 0),
                employee_pf=Decimal(r["employee_pf"] or 0),
                employee_esi=Decimal(r["employee_esi"] or 0),
                professional_tax=Decimal(r["professional_tax"] or 0),
                income_tax=Decimal(r["income_tax"] or 0),
            )
