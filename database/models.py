from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def get_current_time():
    """Obtiene la hora actual en la zona horaria local configurada (naive)."""
    from utils.datetime_utils import get_local_now
    return get_local_now().replace(tzinfo=None)


#ORM: Categorías
class CategoryORM(Base):
    __tablename__ = "categories"
    id = Column("id_category", Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(255))

    articles = relationship("ArticleORM", back_populates="category")

    def __repr__(self) -> str:
        return f"<CategoryORM id={self.id} name={self.name!r}>"


#ORM: Artículos
class ArticleORM(Base):
    __tablename__ = "articles"
    id = Column("id_article", Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    summary = Column(String(500))
    content = Column(Text)
    category_id = Column(Integer, ForeignKey("categories.id_category"), nullable=True)
    views = Column(Integer, nullable=False, default=0)
    #control de concurrencia optimista
    version_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=get_current_time)
    updated_at = Column(DateTime, default=get_current_time, onupdate=get_current_time)

    category = relationship("CategoryORM", back_populates="articles")

    __mapper_args__ = {"version_id_col": version_id}

    def validation_errors(self) -> list[tuple[str, str]]:
        """Reglas propias del artículo, además de las de columnas."""
        errors = []
        if self.slug and not all(c.isalnum() or c == "-" for c in self.slug):
            errors.append(("slug", "Solo se permiten letras, números y guiones"))
        if self.title is not None and not self.title.strip():
            errors.append(("title", "El título no puede estar vacío"))
        return errors

    def __repr__(self) -> str:
        return f"<ArticleORM id={self.id} slug={self.slug!r}>"


__all__ = [
    "Base",
    "CategoryORM",
    "ArticleORM",
    "get_current_time",
]
