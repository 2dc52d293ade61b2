"""
Demo data loader.

    python seed.py      # replace products, teams, events and members with demo data
    python seed.py -d   # wipe those collections
"""

import argparse
import logging
from datetime import datetime

from pymongo.database import Database

from database import create_document, db
from schemas import Event, Member, Product, Team, TeamAchievement

logger = logging.getLogger(__name__)

COLLECTIONS = ("product", "team", "event", "member")

PRODUCTS = [
    Product(name="TeamWave Pro Jersey", description="Official TeamWave gaming jersey with neon accents",
            category="jerseys", price=49.99, image="/images/shop/jersey.jpg", stock=50, rating=4.8),
    Product(name="Neon Gaming Mousepad", description="RGB-illuminated gaming mousepad with TeamWave logo",
            category="accessories", price=24.99, image="/images/shop/mousepad.jpg", stock=100, rating=4.5),
    Product(name="Pro Gaming Headset", description="High-quality gaming headset with surround sound",
            category="peripherals", price=129.99, image="/images/shop/headset.jpg", stock=30, rating=4.9),
    Product(name="TeamWave Hoodie", description="Comfortable hoodie with retro gaming design",
            category="jerseys", price=69.99, image="/images/shop/hoodie.jpg", stock=40, rating=4.7),
    Product(name="Gaming Keychain", description="LED keychain with TeamWave logo",
            category="accessories", price=9.99, image="/images/shop/keychain.jpg", stock=200, rating=4.3),
    Product(name="Mechanical Keyboard", description="RGB mechanical keyboard with custom keycaps",
            category="peripherals", price=159.99, image="/images/shop/keyboard.jpg", stock=25, rating=4.8),
]

MEMBERS = [
    Member(username="NeonSniper", full_name="Alex Johnson", avatar="/images/members/neonsniper.jpg",
           role="Player", primary_game="CS:GO", rank="Global Elite",
           bio="Professional CS:GO player with 5 years of competitive experience.",
           achievements=["National Championship 2023 MVP"], join_date=datetime(2020, 1, 15)),
    Member(username="PixelQueen", full_name="Sarah Williams", avatar="/images/members/pixelqueen.jpg",
           role="Player", primary_game="Valorant", rank="Radiant",
           bio="Former CS:GO player who transitioned to Valorant.",
           achievements=["Valorant Pro League Champion"], join_date=datetime(2020, 6, 10)),
    Member(username="ArcadeLegend", full_name="Michael Chen", avatar="/images/members/arcadelegend.jpg",
           role="Coach", primary_game="League of Legends", rank="Challenger",
           bio="Strategic mastermind behind the League of Legends roster.",
           join_date=datetime(2019, 11, 5)),
    Member(username="StreamWave", full_name="Jordan Lee", role="Content Creator",
           bio="Runs the TeamWave stream and highlight reels.", join_date=datetime(2021, 3, 1)),
]

EVENTS = [
    Event(name="CS:GO Championship 2024", description="Annual CS:GO championship with top teams",
          image="/images/events/csgo-championship.jpg", game="CS:GO",
          start_date=datetime(2027, 6, 15), end_date=datetime(2027, 6, 20), location="Los Angeles Convention Center",
          status="upcoming", teams=["TeamWave CS:GO"], prize_pool=50000, format="Double Elimination",
          registration_deadline=datetime(2027, 6, 1)),
    Event(name="Valorant Pro League Season 2", description="Second season of the Valorant Pro League",
          image="/images/events/valorant-league.jpg", game="Valorant",
          start_date=datetime(2027, 7, 10), end_date=datetime(2027, 8, 20), location="Online",
          status="upcoming", teams=["TeamWave Valorant"], prize_pool=100000, format="League + Playoffs",
          registration_deadline=datetime(2027, 6, 25)),
    Event(name="League of Legends Spring Cup", description="Spring tournament for League of Legends teams",
          image="/images/events/lol-spring.jpg", game="League of Legends",
          start_date=datetime(2023, 4, 5), end_date=datetime(2023, 4, 10), location="Chicago Gaming Arena",
          status="completed", teams=["TeamWave LoL"], prize_pool=25000, format="Single Elimination",
          registration_deadline=datetime(2023, 3, 20)),
]


def _teams(member_ids: dict) -> list:
    return [
        Team(name="TeamWave CS:GO", game="CS:GO", logo="/images/teams/csgo-logo.jpg",
             description="Our professional Counter-Strike: Global Offensive team.",
             members=[member_ids["NeonSniper"]],
             achievements=[TeamAchievement(title="National Championship 2023", date=datetime(2023, 11, 15),
                                           description="1st place at the National CS:GO Championship")]),
        Team(name="TeamWave Valorant", game="Valorant", logo="/images/teams/valorant-logo.jpg",
             description="Our Valorant squad dominating the tactical shooter scene.",
             members=[member_ids["PixelQueen"]]),
        Team(name="TeamWave LoL", game="League of Legends", logo="/images/teams/lol-logo.jpg",
             description="Our League of Legends team competing in regional leagues.",
             members=[member_ids["ArcadeLegend"]]),
    ]


def destroy_data(database: Database) -> None:
    for name in COLLECTIONS:
        result = database[name].delete_many({})
        logger.info("Removed %d documents from %s", result.deleted_count, name)


def import_data(database: Database) -> None:
    destroy_data(database)
    for product in PRODUCTS:
        create_document(database, "product", product)
    member_ids = {
        member.username: str(create_document(database, "member", member)["_id"])
        for member in MEMBERS
    }
    for team in _teams(member_ids):
        create_document(database, "team", team)
    for event in EVENTS:
        create_document(database, "event", event)
    logger.info("Demo data imported")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Load or remove demo data")
    parser.add_argument("-d", "--destroy", action="store_true", help="delete the demo collections instead")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    if args.destroy:
        destroy_data(db)
    else:
        import_data(db)


if __name__ == "__main__":
    main()
