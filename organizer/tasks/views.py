import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from organizer.core.context import get_request_context
from .serializers import TaskSerializer, TaskListSerializer, CalendarRangeSerializer
from . import services

logger = logging.getLogger('organizer.tasks')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def task_list_create(request):
    """List the caller's tasks with reference names, or create a task

    Query params: status, priority, project, context, location
    """
    ctx = get_request_context(request)

    if request.method == 'GET':
        tasks = list(services.list_tasks(ctx, request.query_params))
        serializer = TaskListSerializer(tasks, many=True, context=services.enrichment_context(ctx, tasks))
        logger.debug(f"Returning {len(tasks)} tasks for user {ctx.user_id}")
        return Response(serializer.data)

    task = services.create_task(ctx, request.data, request=request)
    return Response({'id': task.pk}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def task_detail(request, pk):
    """Retrieve, patch or delete one of the caller's tasks"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        task = services.get_task(ctx, pk)
        if task is None:
            return Response({'error': 'Task not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(TaskSerializer(task).data)
    elif request.method == 'DELETE':
        services.remove_task(ctx, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    else:
        task = services.update_task(ctx, pk, request.data, request=request)
        return Response(TaskSerializer(task).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_calendar(request):
    """Tasks due or scheduled within ?start=&end= (epoch ms, inclusive)"""
    ctx = get_request_context(request)
    params = CalendarRangeSerializer(data=request.query_params)
    params.is_valid(raise_exception=True)

    tasks = services.tasks_for_calendar(ctx, params.validated_data['start'], params.validated_data['end'])
    return Response(TaskSerializer(tasks, many=True).data)
