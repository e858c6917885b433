from decimal import Decimal

from agrostock.database import SessionLocal, engine
from agrostock.models import Base, User, Role, Category, Supplier, Product, Client
from agrostock.security import get_password_hash


def init_db():
    print("--- Creando Tablas ---")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    print("--- Iniciando Poblado ---")

    # 1. USUARIOS
    users_to_create = [
        ("admin", "admin123", Role.ADMINISTRADOR),
        ("vendedor1", "venta123", Role.VENDEDOR),
        ("bodega1", "bodega123", Role.BODEGUERO),
    ]

    for uname, password, role in users_to_create:
        if not db.query(User).filter(User.username == uname).first():
            db.add(User(
                username=uname,
                password_hash=get_password_hash(password),
                role=role,
                full_name=uname.capitalize(),
            ))
            print(f"Usuario '{uname}' creado.")
    db.commit()

    # 2. CATEGORÍAS
    for name in ["Fertilizantes", "Agroquímicos", "Semillas", "Veterinaria"]:
        if not db.query(Category).filter(Category.name == name).first():
            db.add(Category(name=name, is_active=True))
    db.commit()
    print("Categorías creadas.")

    # 3. PROVEEDOR
    supplier = db.query(Supplier).filter(Supplier.code == "PROV-001").first()
    if not supplier:
        supplier = Supplier(
            code="PROV-001",
            legal_name="Distribuidora Agrícola del Norte S.A.",
            trade_name="AgroNorte",
            supplier_type="Agroquímicos",
            phone="2222-0000",
            handles_credit=True,
            credit_days=30,
            credit_limit=Decimal("50000.00"),
            outstanding_balance=Decimal("0.00"),
            is_active=True,
        )
        db.add(supplier)
        db.commit()
        print("Proveedor creado.")

    # 4. PRODUCTOS (stock en 0: se carga con entradas)
    fertilizantes = db.query(Category).filter(Category.name == "Fertilizantes").first()
    semillas = db.query(Category).filter(Category.name == "Semillas").first()
    products_list = [
        ("FER-001", "Urea 46% saco 45kg", "saco", fertilizantes, "850.00", "980.00", "10"),
        ("FER-002", "Fórmula 18-46-0 saco 45kg", "saco", fertilizantes, "1100.00", "1275.00", "10"),
        ("SEM-001", "Semilla de maíz híbrido 20kg", "bolsa", semillas, "2300.00", "2650.00", "5"),
    ]

    count = 0
    for code, name, unit, category, cost, price, minimum in products_list:
        if not db.query(Product).filter(Product.code == code).first():
            db.add(Product(
                code=code, name=name, unit_of_measure=unit,
                category=category, supplier=supplier,
                purchase_price=Decimal(cost), sale_price=Decimal(price),
                minimum_stock=Decimal(minimum), current_stock=Decimal("0.00"),
                is_active=True,
            ))
            count += 1
    db.commit()
    print(f"{count} Productos creados.")

    # 5. CLIENTES
    clients_data = [
        {"code": "CLI-001", "name": "Cliente de Contado", "phone": "0000-0000", "allows_credit": False, "credit_limit": 0},
        {"code": "CLI-002", "name": "Finca La Esperanza", "phone": "8888-1234", "allows_credit": True, "credit_limit": 25000},
    ]
    for c in clients_data:
        if not db.query(Client).filter(Client.code == c["code"]).first():
            db.add(Client(client_type="Productor", outstanding_balance=0, is_active=True, **c))
    db.commit()
    print("Clientes creados.")
    db.close()


if __name__ == "__main__":
    init_db()
