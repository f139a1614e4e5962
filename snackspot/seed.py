"""Demo data for local development."""

from decimal import Decimal

from snackspot.extensions import db
from snackspot.models import User, Category, Store, Snack, Review, DataSource
from snackspot.services.category_service import ensure_default_categories

USERS = [
    {'username': 'kiwi_snacker', 'email': 'kiwi@example.com', 'password': 'snackspot123',
     'bio': 'Hunting the best pies on the North Shore', 'avatar_emoji': '\U0001F967'},
    {'username': 'ponsonby_foodie', 'email': 'foodie@example.com', 'password': 'snackspot123',
     'bio': 'Coffee first, then everything else', 'avatar_emoji': '☕'},
    {'username': 'vegan_vic', 'email': 'vic@example.com', 'password': 'snackspot123',
     'bio': 'Plant-based treats only', 'avatar_emoji': '\U0001F331'},
]

STORES = [
    {'name': 'Queen Street Dairy', 'address': '210 Queen Street, Auckland CBD',
     'latitude': '-36.848500', 'longitude': '174.763300', 'owner': 'kiwi_snacker'},
    {'name': 'Ponsonby Central', 'address': '136 Ponsonby Road, Ponsonby',
     'latitude': '-36.856300', 'longitude': '174.745000', 'owner': 'ponsonby_foodie'},
    {'name': 'Britomart Market', 'address': '7 Gore Street, Britomart',
     'latitude': '-36.844100', 'longitude': '174.768200', 'owner': 'ponsonby_foodie'},
    {'name': 'Newmarket Bakehouse', 'address': '277 Broadway, Newmarket',
     'latitude': '-36.869800', 'longitude': '174.777500', 'owner': 'vegan_vic'},
    {'name': 'Hamilton Pie Shop', 'address': '400 Victoria Street, Hamilton',
     'latitude': '-37.787000', 'longitude': '175.279300', 'owner': 'kiwi_snacker'},
]

SNACKS = [
    {'name': 'Mince & Cheese Pie', 'category': 'Savory Snacks', 'store': 'Queen Street Dairy',
     'owner': 'kiwi_snacker', 'description': 'The classic Kiwi lunch'},
    {'name': 'Pineapple Lumps', 'category': 'Sweet Snacks', 'store': 'Queen Street Dairy',
     'owner': 'kiwi_snacker', 'description': 'Chewy pineapple centre in chocolate'},
    {'name': 'Flat White', 'category': 'Drinks', 'store': 'Ponsonby Central',
     'owner': 'ponsonby_foodie', 'description': 'Double shot, silky milk'},
    {'name': 'Lamington', 'category': 'Sweet Snacks', 'store': 'Britomart Market',
     'owner': 'ponsonby_foodie', 'description': 'Sponge cake with chocolate and coconut'},
    {'name': 'Kumara Chips', 'category': 'Healthy Snacks', 'store': 'Britomart Market',
     'owner': 'vegan_vic', 'description': 'Oven-baked sweet potato chips'},
    {'name': 'Vegan Custard Square', 'category': 'Vegan Snacks', 'store': 'Newmarket Bakehouse',
     'owner': 'vegan_vic', 'description': 'Flaky pastry with coconut custard'},
    {'name': 'Steak Pie', 'category': 'Savory Snacks', 'store': 'Hamilton Pie Shop',
     'owner': 'kiwi_snacker', 'description': 'Worth the drive down SH1'},
]

REVIEWS = [
    ('Mince & Cheese Pie', 'ponsonby_foodie', 5, 'Flaky and hot, perfect'),
    ('Mince & Cheese Pie', 'vegan_vic', 3, None),
    ('Flat White', 'kiwi_snacker', 4, 'Solid brew'),
    ('Lamington', 'kiwi_snacker', 5, 'Just like Nana made'),
    ('Lamington', 'vegan_vic', 4, None),
    ('Vegan Custard Square', 'ponsonby_foodie', 4, 'Could not tell it was vegan'),
    ('Kumara Chips', 'kiwi_snacker', 3, 'A bit too salty'),
]


def seed(reset=False):
    """Populate the database. Skips work when demo users already exist."""
    if reset:
        db.drop_all()
    db.create_all()

    added = ensure_default_categories()
    print(f'Categories ready ({added} added)')

    if User.query.filter_by(email=USERS[0]['email']).first():
        print('Database already seeded!')
        return

    print('Seeding database...')

    users = {}
    for data in USERS:
        user = User(username=data['username'], email=data['email'],
                    bio=data['bio'], avatar_emoji=data['avatar_emoji'])
        user.set_password(data['password'])
        db.session.add(user)
        users[user.username] = user

    stores = {}
    for data in STORES:
        store = Store(name=data['name'], address=data['address'],
                      latitude=Decimal(data['latitude']), longitude=Decimal(data['longitude']),
                      created_by=users[data['owner']])
        db.session.add(store)
        stores[store.name] = store

    categories = {c.name: c for c in Category.query.all()}
    snacks = {}
    for data in SNACKS:
        snack = Snack(name=data['name'], description=data['description'],
                      category=categories[data['category']], store=stores[data['store']],
                      user=users[data['owner']], data_source=DataSource.SEEDED)
        db.session.add(snack)
        snacks[snack.name] = snack
    db.session.flush()

    for snack_name, username, rating, comment in REVIEWS:
        db.session.add(Review(snack=snacks[snack_name], user=users[username],
                              rating=rating, comment=comment))
    db.session.flush()

    for snack in snacks.values():
        snack.update_rating()

    db.session.commit()

    print(f'Seeded {len(users)} users, {len(stores)} stores, '
          f'{len(snacks)} snacks and {len(REVIEWS)} reviews.')
    print('\nDemo login: kiwi@example.com / snackspot123')
