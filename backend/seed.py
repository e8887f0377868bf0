from sqlmodel import Session, select

from db import create_db_and_tables, engine
from models import CrewMember, Look, Production


def seed_database():
    """Seed the database with a sample production."""
    create_db_and_tables()
    with Session(engine) as session:
        # Check if data already exists
        existing = session.exec(select(Production)).first()
        if existing:
            print("Database already has data, skipping seed.")
            return

        production = Production(
            name="Spring Editorial",
            shoot_date="2025-03-15",
            call_time="07:00",
            wrap_time="18:00",
            location_address="221 Studio Lane, Brooklyn, NY",
            location_details="Stage B, 2nd floor",
            client_name="Maison Verre",
            producer_name="Dana Ruiz",
            producer_phone="555-0142",
            parking_info="Street parking on Kent Ave, loading dock for gear",
            weather_city="New York",
        )
        session.add(production)
        session.flush()

        crew = [
            CrewMember(production_id=production.id, name="Alex Kim", role="Photographer", call_time="07:00", phone="555-0100"),
            CrewMember(production_id=production.id, name="Sam Ortiz", role="Hair & Makeup", call_time="06:30", phone="555-0101"),
            CrewMember(production_id=production.id, name="Jordan Lee", role="Stylist", call_time="06:45", phone="555-0102"),
            CrewMember(production_id=production.id, name="Riley Chen", role="Model", call_time="08:00"),
        ]
        looks = [
            Look(production_id=production.id, name="Casual Denim", sequence_order=0),
            Look(production_id=production.id, name="Linen Suiting", sequence_order=1),
            Look(production_id=production.id, name="Evening Glamour", sequence_order=2),
        ]

        session.add_all(crew + looks)
        session.commit()
        print(f"Seeded production {production.id} with {len(crew)} crew and {len(looks)} looks.")


if __name__ == "__main__":
    seed_database()
