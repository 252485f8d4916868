import click


def register_admin_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Crea las tablas si no existen."""
        from ..db import db
        from ..models.order import Order  # noqa: F401
        db.create_all()
        click.echo("Tablas creadas.")

    @app.cli.command("db-reset")
    @click.option("--yes", is_flag=True, help="Confirma el reseteo sin preguntar")
    def db_reset(yes):
        """Elimina y recrea todas las tablas (¡destructivo!)."""
        if not yes:
            click.echo("Usa --yes para confirmar el reseteo. Abortando.")
            return
        from ..db import db
        from ..models.order import Order  # noqa: F401
        click.echo("Eliminando tablas...")
        db.drop_all()
        click.echo("Recreando tablas...")
        db.create_all()
        click.echo("Base de datos reiniciada.")

    @app.cli.command("seed-sample")
    def seed_sample():
        """Agrega un pedido de ejemplo (DEMO01) para la demo."""
        from ..db import db
        from ..models.order import Order

        if Order.query.filter_by(code="DEMO01").first():
            click.echo("El pedido de ejemplo ya existe (code=DEMO01)")
            return
        db.session.add(Order(
            code="DEMO01",
            name="Jane Doe",
            email="jane@example.com",
            phone="123-456",
            details="Demo print: 10x A4, color, double-sided",
        ))
        db.session.commit()
        click.echo("Pedido de ejemplo agregado (code=DEMO01)")
