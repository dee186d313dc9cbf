# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool
from gymgate.repositories.models import Base
import logging


class DatabaseManager:
    def __init__(self, database_url: str):
        self.url = database_url
        if database_url.startswith('sqlite'):
            # in-memory sqlite must share a single connection across sessions
            self._engine = create_engine(database_url,
                                         echo=False,
                                         connect_args={"check_same_thread": False},
                                         poolclass=StaticPool)
        else:
            self._engine = create_engine(database_url, echo=False, pool_pre_ping=True)

        self.SessionFactory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self.scoped_session = scoped_session(self.SessionFactory)

    def get_session(self):
        return self.scoped_session()

    def get_engine(self):
        return self._engine

    def create_all(self):
        Base.metadata.create_all(self._engine)
        logging.info(f"database tables ready: {', '.join(inspect(self._engine).get_table_names())}")

    def drop_all(self):
        Base.metadata.drop_all(self._engine)
