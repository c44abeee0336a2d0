"""
Tests for the library entities: ratings, external recommendations and volumes
"""

from builders import VolumeBuilder
from managers import UnitOfWork
from models.database import (
    Library, Series, Chapter, User, AppUserRating, ExternalRecommendation
)
from models.enums import LibraryType, ScrobbleProvider


def _CreateSeries(uow):
    library = Library(name="Manga", type=LibraryType.Manga, folder_path="/media/manga")
    series = Series(name="Berserk", library=library)
    uow.session.add(library)
    uow.session.add(series)
    uow.session.flush()
    return series


def test_rating_belongs_to_user_and_series(db_manager):
    with UnitOfWork(db_manager) as uow:
        series = _CreateSeries(uow)
        admin = uow.session.query(User).filter(User.username == "admin").first()
        uow.session.add(AppUserRating(rating=5, review="Great", tagline="Classic", series=series, user=admin))
        uow.Commit()

    with UnitOfWork(db_manager) as uow:
        rating = uow.session.query(AppUserRating).one()
        assert rating.rating == 5
        assert rating.series.name == "Berserk"
        assert rating.user.username == "admin"
        assert len(rating.user.ratings) == 1


def test_external_recommendation_without_series(db_manager):
    with UnitOfWork(db_manager) as uow:
        series = _CreateSeries(uow)
        uow.session.add(ExternalRecommendation(
            name="Vagabond",
            cover_url="https://covers.example.com/vagabond.png",
            url="https://anilist.co/manga/656",
            ani_list_id=656,
            provider=ScrobbleProvider.AniList
        ))
        uow.session.add(ExternalRecommendation(
            name="Berserk",
            cover_url="https://covers.example.com/berserk.png",
            url="https://myanimelist.net/manga/2",
            mal_id=2,
            provider=ScrobbleProvider.Mal,
            series_id=series.series_id
        ))
        uow.Commit()

    with UnitOfWork(db_manager) as uow:
        recommendations = {r.name: r for r in uow.session.query(ExternalRecommendation).all()}
        assert recommendations["Vagabond"].is_external
        assert not recommendations["Berserk"].is_external
        assert recommendations["Berserk"].series.name == "Berserk"


def test_built_volume_persists_with_chapters(db_manager):
    with UnitOfWork(db_manager) as uow:
        series = _CreateSeries(uow)
        volume = (VolumeBuilder("1-2")
                  .WithSeriesId(series.series_id)
                  .WithChapter(Chapter(range="1", number=1, pages=30))
                  .WithChapter(Chapter(range="2", number=2, pages=28))
                  .Build())
        uow.session.add(volume)
        uow.Commit()
        volume_id = volume.volume_id

    with UnitOfWork(db_manager) as uow:
        series = uow.session.query(Series).one()
        volume = series.volumes[0]
        assert volume.volume_id == volume_id
        assert volume.pages == 58
        assert (volume.min_number, volume.max_number) == (1.0, 2.0)
        assert sorted(c.range for c in volume.chapters) == ["1", "2"]
