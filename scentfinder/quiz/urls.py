from django.urls import path
from . import views

urlpatterns = [
    path('questions/', views.questions, name='quiz_questions'),
    path('start/', views.start, name='quiz_start'),
    path('state/', views.state, name='quiz_state'),
    path('answer/', views.answer, name='quiz_answer'),
    path('toggle/', views.toggle, name='quiz_toggle'),
    path('zodiac/', views.zodiac, name='quiz_zodiac'),
    path('next/', views.next_question, name='quiz_next'),
    path('previous/', views.previous_question, name='quiz_previous'),
    path('submit/', views.submit, name='quiz_submit'),
    path('result/', views.result, name='quiz_result'),
    path('retake/', views.retake, name='quiz_retake'),
    path('reset/', views.reset, name='quiz_reset'),
    path('email-results/', views.email_results, name='quiz_email_results'),
    path('results/<str:user_id>/', views.user_results, name='quiz_user_results'),
]
