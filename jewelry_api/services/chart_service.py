# services/chart_service.py
from ..models.invoice_model import Invoice
from ..utils.logger import Log


class ChartService:
    """Invoice totals for dashboards, aggregated in the store."""

    @staticmethod
    def _pipeline(match_query, group_key):
        return [
            {"$match": match_query},
            {
                "$group": {
                    "_id": group_key,
                    "totalPrice": {"$sum": "$totalPrice"},
                    "totalProfits": {"$sum": "$totalProfits"},
                    "count": {"$sum": 1},
                }
            },
            {"$sort": {"_id": 1}},
        ]

    @staticmethod
    def _rows(match_query, group_key, key_name):
        collection = Invoice.collection()
        rows = []
        for row in collection.aggregate(ChartService._pipeline(match_query, group_key)):
            rows.append({
                key_name: row.get("_id"),
                "totalPrice": round(row.get("totalPrice") or 0, 2),
                "totalProfits": round(row.get("totalProfits") or 0, 2),
                "count": row.get("count", 0),
            })
        return rows

    @staticmethod
    def user_sums(user_id):
        """
        Totals of the invoices written by one user.

        Returns:
            Dict with userId, totalPrice, totalProfits and count (zeros when
            the user has no invoices)
        """
        log_tag = f"[chart_service.py][ChartService][user_sums][{user_id}]"

        rows = ChartService._rows({"userId": user_id}, "$userId", "userId")
        Log.info(f"{log_tag} groups={len(rows)}")

        if rows:
            return rows[0]
        return {"userId": user_id, "totalPrice": 0, "totalProfits": 0, "count": 0}

    @staticmethod
    def branch_sums(branch_id=None):
        """Totals per branch; a single branch when `branch_id` is given."""
        log_tag = f"[chart_service.py][ChartService][branch_sums][{branch_id}]"

        match_query = {"branchId": branch_id} if branch_id else {}
        rows = ChartService._rows(match_query, "$branchId", "branchId")
        Log.info(f"{log_tag} groups={len(rows)}")
        return rows

    @staticmethod
    def branch_users_sums(branch_id=None):
        """Totals per user, inside one branch when `branch_id` is given."""
        log_tag = f"[chart_service.py][ChartService][branch_users_sums][{branch_id}]"

        match_query = {"branchId": branch_id} if branch_id else {}
        rows = ChartService._rows(match_query, "$userId", "userId")
        Log.info(f"{log_tag} groups={len(rows)}")
        return rows
