import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from organizer.core.context import get_request_context
from .serializers import InventoryItemSerializer, InventoryItemListSerializer
from . import services

logger = logging.getLogger('organizer.inventory')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def inventory_list_create(request):
    """List the caller's items (newest first) or create an item

    Query params: category, location
    """
    ctx = get_request_context(request)

    if request.method == 'GET':
        items = list(services.list_items(ctx, request.query_params))
        serializer = InventoryItemListSerializer(items, many=True, context=services.enrichment_context(ctx, items))
        return Response(serializer.data)

    logger.info(f"User {ctx.user_id} creating inventory item with data: {request.data}")
    item = services.create_item(ctx, request.data, request=request)
    return Response({'id': item.pk}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def inventory_detail(request, pk):
    """Retrieve, patch or delete one of the caller's items"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        item = services.get_item(ctx, pk)
        if item is None:
            return Response({'error': 'Item not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(InventoryItemSerializer(item).data)

    if request.method == 'DELETE':
        services.remove_item(ctx, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    item = services.update_item(ctx, pk, request.data, request=request)
    return Response(InventoryItemSerializer(item).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def inventory_categories(request):
    """Distinct categories used by the caller, sorted ascending"""
    ctx = get_request_context(request)
    return Response(services.get_categories(ctx))
