# reset_db.py

import sys

from app import create_app
from extensions import db
from modules.common.seed import seed_demo_data

app = create_app()

with app.app_context():
    print("⚠️ Всі таблиці будуть видалені...")
    db.drop_all()
    print("🧹 Таблиці видалено.")
    db.create_all()
    print("✅ Базу даних створено заново.")
    if "--seed" in sys.argv:
        seed_demo_data()
        print("🌱 Демо-дані додано.")
