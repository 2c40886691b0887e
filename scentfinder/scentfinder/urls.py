"""
URL configuration for scentfinder project.

The quiz is served as a JSON API under /quiz/; the pages that render it are
not part of this project.
"""
from django.urls import path, include

urlpatterns = [
    path('quiz/', include('quiz.urls')),
]
