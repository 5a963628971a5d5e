import logging
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from organizer.core.context import get_request_context
from organizer.core.services import get_settings_values
from . import gemini
from .serializers import DescriptionSuggestionRequestSerializer, PrioritySuggestionRequestSerializer

logger = logging.getLogger('organizer.ai')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def suggest_description(request):
    """Advisory description for an inventory item; nothing is saved"""
    ctx = get_request_context(request)
    serializer = DescriptionSuggestionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    api_key = get_settings_values(ctx)['gemini_api_key']
    logger.info(f"User {ctx.user_id} requested a description suggestion")
    suggestion = gemini.suggest_item_description(
        api_key,
        serializer.validated_data['name'],
        serializer.validated_data['category'],
    )
    return Response({'suggestion': suggestion})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def suggest_priority(request):
    """Advisory priority for a task; nothing is saved"""
    ctx = get_request_context(request)
    serializer = PrioritySuggestionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    api_key = get_settings_values(ctx)['gemini_api_key']
    logger.info(f"User {ctx.user_id} requested a priority suggestion")
    result = gemini.suggest_task_priority(
        api_key,
        serializer.validated_data['title'],
        serializer.validated_data.get('description'),
    )
    return Response(result)
