import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from organizer.core.context import get_request_context
from organizer.core.permissions import get_owned_or_none
from organizer.core.services import filter_owned, create_owned, update_owned, remove_owned
from .filters import LocationFilter
from .models import Location
from .serializers import LocationSerializer

logger = logging.getLogger('organizer.locations')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def location_list_create(request):
    """List the caller's locations or create a new location"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        logger.info(f"User {ctx.user_id} requested location list")
        locations = filter_owned(Location, ctx, LocationFilter, request.query_params)
        serializer = LocationSerializer(locations, many=True)
        return Response(serializer.data)

    logger.info(f"User {ctx.user_id} creating location with data: {request.data}")
    location = create_owned(LocationSerializer(data=request.data), ctx)
    logger.info(f"Location '{location.name}' created by user {ctx.user_id}")
    return Response({'id': location.pk}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def location_detail(request, pk):
    """Retrieve, update or delete one of the caller's locations"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        location = get_owned_or_none(Location, ctx, pk)
        if location is None:
            logger.debug(f"Location {pk} not visible to user {ctx.user_id}")
            return Response({'error': 'Location not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(LocationSerializer(location).data)

    if request.method == 'DELETE':
        logger.info(f"User {ctx.user_id} deleting location {pk}")
        remove_owned(Location, ctx, pk, entity='Location')
        return Response(status=status.HTTP_204_NO_CONTENT)

    logger.info(f"User {ctx.user_id} patching location {pk} with data: {request.data}")
    location = update_owned(Location, ctx, pk, LocationSerializer, request.data, entity='Location')
    return Response(LocationSerializer(location).data)
