# Путь: backend/geo/serializers.py
# Назначение: Сериализаторы гео-справочника. Родители отдаются мини-объектом (name/code),
# как раньше делал populate на фронт.

from rest_framework import serializers

from .models import Area, City, Country, Location, State


class CountryMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Country
        fields = ["id", "name", "code", "slug"]


class StateMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = State
        fields = ["id", "name", "code", "slug"]


class CityMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = City
        fields = ["id", "name", "pincode", "slug"]


class CountrySerializer(serializers.ModelSerializer):
    class Meta:
        model = Country
        fields = ["id", "name", "slug", "code", "longitude", "latitude", "created_at", "updated_at"]


class StateSerializer(serializers.ModelSerializer):
    country = CountryMiniSerializer(read_only=True)

    class Meta:
        model = State
        fields = ["id", "name", "slug", "code", "country", "created_at", "updated_at"]


class CitySerializer(serializers.ModelSerializer):
    country = CountryMiniSerializer(read_only=True)
    state = StateMiniSerializer(read_only=True)

    class Meta:
        model = City
        fields = ["id", "name", "slug", "pincode", "country", "state", "created_at", "updated_at"]


class AreaSerializer(serializers.ModelSerializer):
    country = CountryMiniSerializer(read_only=True)
    state = StateMiniSerializer(read_only=True)
    city = CityMiniSerializer(read_only=True)

    class Meta:
        model = Area
        fields = ["id", "name", "slug", "pincode", "country", "state", "city", "created_at", "updated_at"]


class LocationSerializer(serializers.ModelSerializer):
    """Локация целиком - её slug участвует в SEO-адресах товар×город."""
    country = CountryMiniSerializer(read_only=True)
    state = StateMiniSerializer(read_only=True)
    city = CityMiniSerializer(read_only=True)

    class Meta:
        model = Location
        fields = [
            "id", "name", "slug", "pincode", "timezone", "language",
            "country", "state", "city", "created_at", "updated_at",
        ]
