# cafe_pos/modules/customers/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional

from cafe_pos.shared.database.models import Customer

class CustomersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_customer(self, name: str, tier: str, email: Optional[str], phone: Optional[str]) -> Customer:
        customer = Customer(name=name, tier=tier, email=email, phone=phone, is_active=True)
        self.db.add(customer)
        self.db.flush()
        return customer

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_customers(self, tier: Optional[str] = None) -> List[Customer]:
        """Todos los clientes, opcionalmente filtrados por tipo"""
        query = self.db.query(Customer)
        if tier:
            query = query.filter(Customer.tier == tier)
        return query.order_by(Customer.name).all()

    def set_active(self, customer_id: int, is_active: bool) -> Optional[Customer]:
        customer = self.get_customer(customer_id)
        if not customer:
            return None

        customer.is_active = is_active
        self.db.flush()
        return customer
