def register_blueprints(app):
    from modules.reference.products.routes import products_bp
    from modules.reference.partners.routes import partners_bp
    from modules.reference.employees.routes import employees_bp
    from modules.crm.routes import leads_bp
    from modules.dashboard.routes import dashboard_bp
    from modules.transactions import transactions_bp
    from modules.warehouse import warehouse_bp

    # Довідники
    app.register_blueprint(products_bp)
    app.register_blueprint(partners_bp)
    app.register_blueprint(employees_bp)

    # CRM / дашборд
    app.register_blueprint(leads_bp)
    app.register_blueprint(dashboard_bp)

    # Документи і склад
    app.register_blueprint(transactions_bp)
    app.register_blueprint(warehouse_bp)
