# jewelry_api/models/invoice_model.py

from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel


class Invoice(BaseModel):
    """
    A sale. Invoices are immutable once written; there is no update or
    delete path.
    """

    collection_name = COLLECTIONS["INVOICES"]
    soft_deletable = False

    def __init__(self, branch_id, user_id, customer_name, customer_phone, items,
                 total_price, gold_price, total_profits=None):
        super().__init__()
        self.branchId = branch_id
        self.userId = user_id
        self.customerName = customer_name
        self.customerPhone = customer_phone
        self.items = [
            {
                "name": line.get("name"),
                "quantity": line.get("quantity"),
                "weight": line.get("weight"),
                "price": line.get("price"),
            }
            for line in items
        ]
        self.totalPrice = total_price
        self.totalProfits = total_profits if total_profits is not None else 0
        self.goldPrice = gold_price

    @classmethod
    def list_for(cls, branch_id=None):
        query = {}
        if branch_id is not None:
            query["branchId"] = branch_id
        return cls.find(query)
