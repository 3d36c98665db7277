#!/usr/bin/env python3
"""
  This demo application serves the otter dashboard api for a small blog database
  When otter is installed, you can run this app:
  $ python3 demo_otter.py [Listener-IP]

  This will run the example on http://Listener-Ip:5000/otter/api/

  - An sqlite database is created and populated
  - The Otter resources are registered and exposed
"""
import sys
import datetime
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from otter import Otter, OtterResource, ResourceRegistry

db = SQLAlchemy()

book_genres = db.Table(
    "book_genres",
    db.Column("book_id", db.Integer, db.ForeignKey("books.id"), primary_key=True),
    db.Column("genre_id", db.Integer, db.ForeignKey("genres.id"), primary_key=True),
)


# Example sqla database objects
class UserModel(db.Model):
    __tablename__ = "users"
    __foreign_key__ = "user_id"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String, default="")
    email = db.Column(db.String, default="")
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)
    books = db.relationship("BookModel", back_populates="user")


class BookModel(db.Model):
    __tablename__ = "books"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String, default="")
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)
    user = db.relationship("UserModel", back_populates="books")
    genres = db.relationship("GenreModel", secondary=book_genres)


class GenreModel(db.Model):
    __tablename__ = "genres"
    __foreign_key__ = "genre_id"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String, default="")


# Otter resources, the relations refer to the resource names
class User(OtterResource):
    model = UserModel
    title = "Users"

    @classmethod
    def relations(cls):
        return {"books": "Book"}


class Book(OtterResource):
    model = BookModel
    title = "Books"

    @classmethod
    def relations(cls):
        return {"user": "User", "genres": "Genre"}


class Genre(OtterResource):
    model = GenreModel
    title = "Genres"


def create_app(host="localhost"):
    app = Flask("demo_app")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", DEBUG=True)
    db.init_app(app)

    with app.app_context():
        db.create_all()
        Otter(app, registry=ResourceRegistry([User, Book, Genre]))
        # Populate the db with users, books and genres
        genres = [GenreModel(name=name) for name in ("fiction", "history", "poetry")]
        for i in range(20):
            user = UserModel(name=f"user{i}", email=f"email{i}@email.com")
            book = BookModel(name=f"test book {i}", genres=genres[: i % 3 + 1])
            user.books.append(book)
            db.session.add(user)
        db.session.commit()
        print(f"Created API: http://{host}:5000/otter/api/")

    return app


# Address where the api will be hosted, change this if you're not running the app on localhost!
host = sys.argv[1] if sys.argv[1:] else "127.0.0.1"
app = create_app(host=host)

if __name__ == "__main__":
    app.run(host=host)
