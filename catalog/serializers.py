# Путь: backend/catalog/serializers.py
# Назначение: Сериализаторы товаров, SEO-записей и тематических страниц.
#   ✅ seo_url - готовый путь для фронта
#   ✅ SEO-запись отдаёт мини-товар и мини-локацию

from rest_framework import serializers

from geo.models import Location
from .models import Product, Seo, TopicPage


class ProductMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "slug"]


class LocationMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ["id", "name", "slug"]


class ProductSerializer(serializers.ModelSerializer):
    seo_url = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id", "name", "slug", "product_title", "product_tagline",
            "short_description", "full_description",
            "sku", "vendor_fabric_code", "um", "currency",
            "gsm", "oz", "cm", "inch", "purchase_price", "sales_price", "leadtime",
            "popular_product", "top_rated_product", "landing_page_product",
            "rating_value", "rating_count",
            "seo_url", "created_at", "updated_at",
        ]

    def get_seo_url(self, obj):
        return f"/fabric/{obj.slug}/"


class SeoSerializer(serializers.ModelSerializer):
    product = ProductMiniSerializer(read_only=True)
    location = LocationMiniSerializer(read_only=True)
    seo_url = serializers.SerializerMethodField()

    class Meta:
        model = Seo
        fields = [
            "id", "slug", "product", "location", "canonical_url", "excerpt",
            "keywords", "content_language", "og_locale", "seo_url", "created_at", "updated_at",
        ]

    def get_seo_url(self, obj):
        if obj.location_id:
            return f"/fabric/{obj.slug}/{obj.location.slug}/"
        return f"/fabric/{obj.slug}/"


class TopicPageSerializer(serializers.ModelSerializer):
    seo_url = serializers.SerializerMethodField()

    class Meta:
        model = TopicPage
        fields = [
            "id", "name", "slug", "meta_title", "meta_description", "keywords",
            "canonical_url", "excerpt", "description_html", "status", "seo_url",
            "created_at", "updated_at",
        ]

    def get_seo_url(self, obj):
        return f"/topic/{obj.slug}/"
