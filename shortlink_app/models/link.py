from sqlalchemy import Column, Integer, String, DateTime
from shortlink_app.database.connection import Base


class Link(Base):
    """
    Link model: a short code mapped to a target URL plus click stats.
    
    Only total_clicks and last_clicked_at ever change after insert, and only
    through LinkStore.increment_click.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True is what stops two concurrent creates from sharing a code
    code = Column(String(8), unique=True, nullable=False, index=True)
    target_url = Column(String(2048), nullable=False)
    total_clicks = Column(Integer, nullable=False, default=0)
    last_clicked_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Link code={self.code!r} clicks={self.total_clicks}>"
